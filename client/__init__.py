"""
Client-side generation core: the controller the presentation layer drives,
and the gateways it uses to reach the Explorer API.
"""
