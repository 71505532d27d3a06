# Looker User Bulk Delete Tool

__version__ = "0.1"
