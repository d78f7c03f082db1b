"""Battle mechanics: type matchups, stat ranges and the type predictor."""
