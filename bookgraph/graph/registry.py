import bookgraph as g


registry = g.TypeRegistry()
