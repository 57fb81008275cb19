"""WTForms used by the storefront and dashboard."""
