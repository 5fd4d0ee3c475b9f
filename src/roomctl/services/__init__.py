"""Service layer — business logic returning ServiceResult.

Services bridge the domain and infrastructure layers and are the only
place where ValidationError and StoreError become user-facing results.
"""
