"""
Provider implementations package.

Package Structure:
    providers/
    ├── __init__.py
    └── azure/
        ├── provider.py     # AzureProvider: credential + SDK clients
        ├── naming.py       # Randomized per-run resource names
        ├── workflow.py     # Named steps + cleanup for the orchestrator
        └── layers/         # Resource-specific SDK calls
"""
