#!/usr/bin/env python3

"""
Render text as large placard pages in a PDF.
"""

# Standard Library
import sys

# local repo modules
import pdfplaca.cli


if __name__ == "__main__":
	sys.exit(pdfplaca.cli.main())
