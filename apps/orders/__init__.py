"""
Orders App - Order Intake

Turns a checked-out cart into an ``Order`` with its ``OrderItem`` rows.

Key Features:
- Server-side re-pricing of every cart line before anything is written
- Human-readable order numbers ``ORD-YYMMDD-NNNN`` allocated without a
  central sequence; collisions get a random ``-RRR`` suffix and are retried
- Order and items written as one atomic unit
- Soft delete only, so order numbers are never reused

Architecture:
- Models: Order, OrderItem
- Services: order_numbers (allocation), order_intake (create/update)
- Views: OrderViewSet
"""
