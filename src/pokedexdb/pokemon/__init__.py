"""Pokémon records: storage model, filter criteria, queries and CSV import."""
