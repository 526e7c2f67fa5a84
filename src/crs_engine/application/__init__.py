"""Application services around the scoring domain."""
