"""
Customer API — Routes Package
==============================

Route Inventory:
    - customers.py:  GET  /customers          (list customers)
                     GET  /customers/{id}     (get one customer)
                     POST /customers          (create customer)
                     PUT  /customers/{id}     (replace customer)
    - health.py:     GET  /health             (service health check)

Routes stay thin: read the request, call the store, map the outcome to a
status code and a JSON body.
"""
