"""Console commands — administrative utilities run outside the HTTP app."""
