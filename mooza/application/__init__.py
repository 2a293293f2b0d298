"""Application layer services.

Import services directly from their modules:
    from mooza.application.search_service import SearchApplicationService
    from mooza.application.catalog_service import CatalogApplicationService
"""
