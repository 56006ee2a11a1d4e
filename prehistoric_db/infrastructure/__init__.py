"""Infrastructure: MongoDB access, snapshot I/O, password hashing."""
