"""HTTP proxy exposing CRUD endpoints for users backed by an upstream REST API."""

__version__ = "1.0.0"
