"""sunmoon/core — Types, configuration, exceptions and input validators."""
