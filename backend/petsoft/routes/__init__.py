# Routes package init
"""
PetSoft Backend — API Routes Package
======================================

Route Inventory:
    - auth.py:     POST /signup, POST /login, POST /logout
    - pets.py:     GET/POST /app/pets, GET/PUT /app/pets/{id},
                   POST /app/pets/{id}/checkout
    - payment.py:  POST /payment/checkout-session
    - health.py:   GET  /health

Routes are thin: they read the request, call one service action and turn
its outcome into a response (see responses.py).
"""
