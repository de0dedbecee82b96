"""AWS infrastructure - client, pagination and resource handlers."""
