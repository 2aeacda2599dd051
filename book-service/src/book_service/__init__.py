"""Book Service: the book catalogue, with authentication delegated to the User Service."""
