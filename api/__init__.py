# Nameserver HTTP routes
