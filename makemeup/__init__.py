# Make Me Up
# Foundation shade matching: skin-tone color science, catalog ranking
# and pigment recreation.
