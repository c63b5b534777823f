"""Shared configuration, logging, constants and error types."""
