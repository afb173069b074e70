"""Storefront service package."""
