"""Record update layer.

This module encodes change-sets into the PPM request payload format
and pushes them to the request REST endpoint.
"""
