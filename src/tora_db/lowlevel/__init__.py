from .diskops import (
    read_bytes as read_bytes,
    read_db as read_db,
    write_bytes as write_bytes,
    write_db as write_db,
)
