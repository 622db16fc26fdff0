"""Services for projectdesk."""
