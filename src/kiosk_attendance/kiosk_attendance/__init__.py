"""Kiosk attendance package.

Feature modules (attendance, gateway, kiosk, ...) sit behind a thin Flask
controller layer; services and stores are wired explicitly in ``container``.
"""
