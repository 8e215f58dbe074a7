#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Mask boxes on a receipt image and overlay new text.
"""

import receipt_overlay.cli


if __name__ == "__main__":
	receipt_overlay.cli.main()
