"""
Outbound notifications. Nothing on the request path sends mail.
"""
