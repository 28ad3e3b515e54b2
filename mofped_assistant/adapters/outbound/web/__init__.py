"""Web page fetching."""
