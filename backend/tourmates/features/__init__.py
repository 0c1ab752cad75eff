"""
Feature modules.

- users: accounts and location preferences
- tours: tour records (creation, closing)
- notifications: nearby tour notifications
"""
