"""Link-decoration strategies and layout selection."""
