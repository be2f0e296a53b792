"""taskdesk: task assignment, status tracking and performance metrics service."""
