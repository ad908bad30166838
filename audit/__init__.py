"""
Audit logging for rooms, occupants and room requests.
"""
