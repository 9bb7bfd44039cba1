# Services package init
"""
PetSoft Backend — Services Layer
==================================

What:  The actions and the pieces they are built from. Routes call services;
       services never see HTTP objects.

Service Inventory:
    - ownership:         Load a pet and check it belongs to the acting user
    - pet_service:       addPet / editPet / checkoutPet and dashboard reads
    - auth_service:      signUp / logIn / logOut
    - session_provider:  Credentials check and signed session tokens
    - passwords:         bcrypt hashing off the event loop
    - payment_service:   Hosted checkout session for the account fee
    - payment_base / stripe_gateway: Payment gateway interface and Stripe client
    - view_cache:        Cached dashboard reads, invalidated after writes
"""
