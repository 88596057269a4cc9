"""Field reconciliation layer.

This module decides which feature fields change, derives computed
fields, and assembles ordered change-sets for the update layer.
"""
