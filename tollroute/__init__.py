"""TollRoute - European vignette and toll route analysis."""
