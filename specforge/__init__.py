"""Generate Spring/Angular stubs from an OpenAPI spec and publish the Java library."""

__version__ = "1.0.0"
