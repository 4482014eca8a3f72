"""Vector storage for ingested documents."""
