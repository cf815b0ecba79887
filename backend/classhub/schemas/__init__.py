# Schemas package init
"""
ClassHub Backend — Pydantic Schemas
=====================================

Request bodies (`*Create`) and response models (`*Response`) per resource,
plus the shared error and health bodies in common.py.
"""
