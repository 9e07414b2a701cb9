"""MusterSheets package.

Organized by feature modules (sheets, attendance, receipts, results)
with a thin Flask controller layer over service/repository layers.
"""
