"""HTTP API package for the Sun-Sathi estimator."""
