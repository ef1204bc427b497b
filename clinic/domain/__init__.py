"""Domain records, slot enumeration and validation rules."""
