"""Domain layer - core booking logic and interfaces.

This layer contains:
- Domain entities (flights, selections, passengers, bookings)
- The booking service client interface
- The booking error taxonomy
"""
