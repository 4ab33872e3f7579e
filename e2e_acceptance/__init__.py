"""End-to-end acceptance suite support: configuration bootstrap and reporting."""
