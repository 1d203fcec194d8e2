"""Spreadsheet engine contract and its openpyxl implementation."""
