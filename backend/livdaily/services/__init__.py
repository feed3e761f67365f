"""
LivDaily Backend — Services Layer
===================================

What:  Business logic between the routes (HTTP) and the database.
How:   Each service is a stateless singleton; the request's AsyncSession is
       passed into every call.

Service Inventory:
    - auth_service:          bearer sessions, sign-up / sign-in (bcrypt)
    - subscription_service:  lazy subscription resolve, premium gate, admin grant
    - journal/grounding/sleep/rhythm/movement/nutrition services: user-scoped CRUD
    - profile_service:       lazily created profile and habit patterns
    - mindfulness_service:   gated content, content catalogue (incl. generated),
                             mindfulness journal
    - motivation_service:    weekly motivation
    - admin_service:         users, roles, counters
    - ai_service:            prompt templates over LLMService (GeminiService)
"""
