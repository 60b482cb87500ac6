"""Database Layer: mapper introspection and the timestamp capability mixin."""
