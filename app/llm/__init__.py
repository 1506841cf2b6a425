"""LLM access package.

Architectural role:
    Provides provider configuration, vendor request/response adapters, and the
    HTTP transport used by the generation dispatcher.

Module split:
    - `provider_config`: environment-driven credentials, defaults, availability.
    - `adapters`: per-vendor request shaping and text extraction.
    - `client`: HTTP transport.
    - `service`: `GenerationDispatcher`, the canonical generation entrypoint.
"""
