"""Game rules: character records and the systems that compute on them."""
