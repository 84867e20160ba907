"""Network domain: Kube-OVN VPCs, EIPs, NAT rules, VIPs and LoadBalancer services."""
