"""
Genotyping Chip Strand File Matcher.

Guesses which chip strand annotation file (Will Rayner's strand archives)
best matches a PLINK .bim file by scoring every candidate concurrently.
"""

__version__ = "1.0.0"
__author__ = "Data Tecnica International"
