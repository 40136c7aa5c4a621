# Where: vaultify.features.metadata.__init__
# What: Metadata reconciliation feature (domain rules and use cases).
# Why: Import submodules directly; this package stays light so config can
#      reuse domain constants without import cycles.
