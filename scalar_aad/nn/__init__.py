"""
Neural-network building blocks on top of the scalar engine.
"""

from .modules import Module, Neuron, Layer, MLP

__all__ = ['Module', 'Neuron', 'Layer', 'MLP']
