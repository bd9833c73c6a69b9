"""Configuration: TOML discovery, pydantic section models, settings, logging."""
