"""Infrastructure layer — line I/O and the read-execute session loop.

This layer depends on stdlib, anyio, and click for terminal I/O, and drives
the service and output layers. It never reaches into the Robot directly
except to read its position for rendering.
"""
