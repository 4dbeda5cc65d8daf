"""Network topology routing simulator.

Build a topology of PCs, routers and switches, route packets through it with
breadth-first search or Dijkstra's algorithm, and play them hop by hop.
"""
