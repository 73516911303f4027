"""linkbio: link-in-bio profile API (auth with TOTP MFA, links, products)."""

__version__ = "0.1.0"
