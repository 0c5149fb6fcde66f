"""Services Layer: composition of core components for the API.

Invariants:
    - Services log outcomes; core never does
    - One service object per process, created in the FastAPI lifespan
"""
