"""create-rn-library -- scaffolds React Native libraries from template trees."""

__version__ = "0.1.0"
