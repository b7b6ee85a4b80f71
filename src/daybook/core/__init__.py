"""Shared infrastructure: config, exceptions, logging, storage media."""
