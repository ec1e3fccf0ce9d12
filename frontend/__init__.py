"""Python client side of the Wardrobe API."""
