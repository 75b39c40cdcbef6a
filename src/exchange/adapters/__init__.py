"""
============================

Exchange REST Adapters.

============================

This package contains adapter implementations for the supported exchanges.
Adapters sign private requests, translate exchange-specific responses into
canonical models and implement the ExchangeProtocol capability set.

"""
