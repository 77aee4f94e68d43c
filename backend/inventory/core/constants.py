"""
Application Constants
Defines constant values used throughout the application.
"""

# Barcode symbologies
BARCODE_TYPE_EAN8 = "EAN8"
BARCODE_TYPE_EAN13 = "EAN13"
BARCODE_TYPE_UPC = "UPC"

VALID_BARCODE_TYPES = [BARCODE_TYPE_EAN8, BARCODE_TYPE_EAN13, BARCODE_TYPE_UPC]

# Column sizes shared by table definitions
NAME_MAX_LENGTH = 255
BARCODE_VALUE_MAX_LENGTH = 100
BARCODE_TYPE_MAX_LENGTH = 10
