"""Room and user persistence for the Draw.it session service."""
