"""Guest list domain: invitations, guest counts, a response saga and logging."""