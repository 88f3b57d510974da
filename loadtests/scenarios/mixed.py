"""Mixed storefront workload scenario.

Combines browsing, shopping and catalogue maintenance with weights that
model a small shop's traffic. This is the recommended scenario for a load
baseline.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalogue import BrowseCatalogueJourney, ProductMaintenanceJourney
from loadtests.scenarios.checkout import AbandonedCartJourney, CheckoutJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload.

    Weight distribution:

    Browsing (60%): anonymous search and product detail reads
    Shopping (35%): checkouts and abandoned carts
    Admin (5%): product creation and stock toggles

    Checkouts read the cart, the catalogue and the order sequence in one
    request, so this mix exercises the order-number allocation under
    concurrent writers.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowseCatalogueJourney: 12,
        CheckoutJourney: 5,
        AbandonedCartJourney: 2,
        ProductMaintenanceJourney: 1,
    }
