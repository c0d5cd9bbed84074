"""Title segmentation, composition and fetching."""
