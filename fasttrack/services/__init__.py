"""Business actions and read models behind the routes."""
