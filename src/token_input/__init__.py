"""
token_input — decision logic for a fungible-asset amount/token input.

- core/         : domain models, decimal math, JSON contracts
- gatekeeper/   : classification gates (unknown asset, freeze risk)
- selection/    : token selection state machine
- panel/        : controller wiring configuration, providers and events
"""

__version__ = "0.1.0"
