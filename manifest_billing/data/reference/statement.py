"""
Statement Configuration

Layout and parsing settings for consolidated statements.
"""

DATE_FORMAT = "%d/%m/%Y"                  # Primary manifest date format
DEFAULT_TITLE = "Consolidated Report"     # Used when no folder names are given
TITLE_SEPARATOR = " + "                   # Joins folder names into a title
ROWS_PER_PAGE = 12                        # Statement lines per printed page
HEAVY_DETAIL_SEPARATOR = "+"              # "15+20+30"
