"""Namespace for graph utilities; it holds no modules at present."""