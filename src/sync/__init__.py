"""Synchronization orchestration.

This module runs project-to-feature synchronization end to end and
applies the configured failure policy to collaborator errors.
"""
