"""Cathay Metal HRIS package.

Organized by feature modules (system onboarding, user onboarding, organization, ...)
with a thin Flask controller layer over service/repository layers.
"""
