"""
Product Barcode Registry
Product and barcode persistence with soft delete and FK-safe barcode removal.
"""
