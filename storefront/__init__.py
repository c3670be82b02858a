# Restaurant Storefront
