"""Tests du suivi terrain et des statistiques commerciaux"""
