"""Application services built on top of the record store."""
