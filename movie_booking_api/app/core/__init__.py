"""Configuration, logging, storage and error primitives shared by the app."""
