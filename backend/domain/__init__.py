"""Domain rules, grouped per aggregate."""
