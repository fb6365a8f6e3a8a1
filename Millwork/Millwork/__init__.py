# PATH: /Millwork/Millwork/__init__.py
"""Project package for the Millwork production scheduler."""
