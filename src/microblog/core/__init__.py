"""Core building blocks of the microblog rendering pipeline."""
