"""Read-only reference tables: prices, rates, links and provider ids."""
