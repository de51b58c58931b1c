"""Snapshot providers and ABI codec for the allocator."""

from src.data.provider_factory import create_provider

__all__ = ["create_provider"]
