# Nameserver Core — topology, registry storage, registration
#
# REGISTRY RULES
# ==============
#
# 1. POSITIONS ARE THE TREE — A node's position is its 1-based slot in an
#    implicit 6-ary tree. Position 1 is the root. Positions are gapless and
#    come from the store, never from a counter in this process.
#
# 2. ADDRESSES ARE UNIQUE — One record per address. Registering a known
#    address replays the parent it was given the first time.
#
# 3. RECORDS ARE IMMUTABLE — No update, no delete. Topology never
#    rebalances.
#
# 4. ALL OR NOTHING — A registration commits its record and resolves its
#    parent in one transaction, or commits nothing.
