"""User interfaces built on top of the microblog API."""
