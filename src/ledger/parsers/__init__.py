"""Statement parsers.

Only the ZKB account statement CSV layout is supported (see zkb_csv).
"""
