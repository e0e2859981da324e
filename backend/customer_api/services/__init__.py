"""
Customer API — Data-Access Layer
=================================

What:  Storage-agnostic operations over the Customer entity.
Why:   Keeps MongoDB query syntax out of the route handlers.

Service Inventory:
    - CustomerStore (abstract): get / get_all / create / update / ping
    - MongoCustomerStore: Concrete implementation over a MongoDB collection
"""
