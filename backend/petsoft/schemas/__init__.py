# Schemas package init
"""
PetSoft Backend — Pydantic Schemas
====================================

    - auth.py:    credential input, decoded session identity
    - pet.py:     pet form input and dashboard responses
    - common.py:  message, error and health bodies
"""
