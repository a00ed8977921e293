"""
Core Schema Package.

Transport boundary schemas for the order relay queues.

Exports:
    OrderMessage: Order envelope carried on both relay queues
    encode_order_message, decode_order_message: Envelope codec
"""

from .queue import OrderMessage, encode_order_message, decode_order_message

__all__ = ['OrderMessage', 'encode_order_message', 'decode_order_message']
