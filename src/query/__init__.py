"""PPM query layer.

This module builds SQL-runner requests and maps their tabular
responses into typed field records for reconciliation.
"""
