"""Transaction analytics pipeline: query building, collection, metrics, prediction."""
