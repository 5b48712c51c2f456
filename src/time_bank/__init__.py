"""Time bank package.

Feature modules (punches, classification, balance, ledger, periods, ...)
with a thin Flask controller layer over service/repository layers.
"""
