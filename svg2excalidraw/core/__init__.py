"""Configuration, models, errors and the conversion facade."""
