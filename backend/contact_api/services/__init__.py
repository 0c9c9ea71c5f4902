# Services package init
"""
Contact API — Services Layer
==============================

Service Inventory:
    - PhotoStore:     Filename derivation, photo writes/reads, public URL
    - ContactService: Contact CRUD, pagination, and the update-photo workflow

Services receive their collaborators explicitly (AsyncSession per call,
PhotoStore at construction) so they can be tested without HTTP or a real DB.
"""
