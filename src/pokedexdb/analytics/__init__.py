"""Analytics aggregates over the Pokémon collection."""
