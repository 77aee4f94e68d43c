"""
Data Access Module
Stores that read and write product and barcode rows.
"""
