from .router import IntelligentRouter, RoutingRule, ROUTING_RULES

__all__ = ["IntelligentRouter", "RoutingRule", "ROUTING_RULES"]
