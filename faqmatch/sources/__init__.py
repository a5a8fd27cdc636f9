"""Remote knowledge-base sources: REST tables and HTML FAQ pages."""
