from .compressed_liquid import CompressedLiquidTable, NIST_HEADERS, PROPERTY_KEYS, interp_1d
