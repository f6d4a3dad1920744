"""
Feature modules for the ChurchContent backend.

- auth: bearer-token resolution through Supabase
- security: request validation schemas and the rate limiter
- usage: generation metering and free-tier entitlement
- billing: Stripe checkout, portal and subscription webhooks
- generation: prompts, LLM calls, sermon section parsing
- content: the per-user saved content library
- feedback: visitor feedback and complaints

Routes depend on a module's interfaces; the concrete services are wired
in api/dependencies.py.
"""
