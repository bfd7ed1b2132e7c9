"""Contracts layer - protocols shared between layers."""

from .protocols import Packer

__all__ = ["Packer"]
